from flask import render_template

from .. import blueprint


@blueprint.route('/unauthorized')
def unauthorized():
    """Shown when a signed-in user lacks the role a page needs."""
    return render_template('access_control/unauthorized.html'), 403
