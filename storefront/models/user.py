"""Signed-in identity."""

from flask_login import UserMixin


class User(UserMixin):
    """Identity of the signed-in customer, rebuilt from the session."""

    def __init__(self, uid, email, display_name=None):
        self.uid = uid
        self.email = email
        self.display_name = display_name

    def get_id(self):
        return self.uid

    def to_dict(self):
        return {
            'uid': self.uid,
            'email': self.email,
            'display_name': self.display_name,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(uid=data['uid'], email=data['email'], display_name=data.get('display_name'))

    def __repr__(self):
        return f'<User {self.email}>'
