import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///scheduling.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
    MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "Recruit Team")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")
    # 対面面接の前後にブロックする時間（分）。候補者ごとの設定が優先
    SCHEDULE_ONSITE_BLOCK_MINUTES = int(os.getenv("SCHEDULE_ONSITE_BLOCK_MINUTES", "60"))
    SCHEDULE_BULK_MAX_SLOTS = int(os.getenv("SCHEDULE_BULK_MAX_SLOTS", "200"))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    REDIS_URL = None
    SENDGRID_API_KEY = None
