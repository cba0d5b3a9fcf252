import secrets

from ..extensions import db
from .base import TimestampMixin

class Candidate(db.Model, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    # 登録した担当者。アクセス権限の判定に使う
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), index=True)

    # 公開日程調整URLのトークン
    schedule_token = db.Column(db.String(64), unique=True, index=True)
    # 対面面接の前後ブロック時間（分）。NULL なら設定値を使う
    onsite_block_minutes = db.Column(db.Integer)

    registered_by = db.relationship("User", lazy="joined")

    def issue_schedule_token(self):
        self.schedule_token = secrets.token_urlsafe(24)
        return self.schedule_token

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.name!r}>"
