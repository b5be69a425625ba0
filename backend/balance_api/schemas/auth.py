"""Account and session Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SignupSchema(Schema):
    """Input payload for account creation.

    The password policy itself is enforced by the session service.
    """

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    username = fields.String(required=True, validate=validate.Length(min=1, max=50))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(Schema):
    """JSON form of the refresh-token body accepted by logout and refresh."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=2048))
