from ..extensions import db
from .base import TimestampMixin

class Company(db.Model, TimestampMixin):
    __tablename__ = "companies"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, unique=True)
    contact_name = db.Column(db.String(100))
    contact_email = db.Column(db.String(254))

    def to_dict(self):
        return {"id": self.id, "name": self.name}
