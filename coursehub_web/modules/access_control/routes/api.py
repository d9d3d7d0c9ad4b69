from flask import jsonify

from coursehub_web.modules.auth.interface import get_session_store
from .. import blueprint
from ..decorators import protected_view
from ..logics.policies import capability_map
from ..schemas import AccessSummarySchema


@blueprint.route('/api/access/me', methods=['GET'])
@protected_view()
def get_my_access():
    """
    Get the current user's role and what it allows.
    """
    session = get_session_store().current()
    data = {
        'user_id': session.identity.id,
        'role': session.role.value,
        'capabilities': capability_map(session),
    }
    return jsonify(AccessSummarySchema().dump(data))
