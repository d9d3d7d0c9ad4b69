from marshmallow import Schema, fields


class CapabilitiesSchema(Schema):
    can_browse = fields.Boolean(data_key='canBrowse')
    can_create_course = fields.Boolean(data_key='canCreateCourse')
    can_view_own_courses = fields.Boolean(data_key='canViewOwnCourses')
    can_view_own_attempts = fields.Boolean(data_key='canViewOwnAttempts')


class AccessSummarySchema(Schema):
    user_id = fields.Int(data_key='userId')
    role = fields.String()
    capabilities = fields.Nested(CapabilitiesSchema)
