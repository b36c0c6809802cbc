import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///panelscore.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 평가위원 등록 시 비밀번호가 비어 있으면 사용
    DEFAULT_EVALUATOR_PASSWORD = os.getenv("DEFAULT_EVALUATOR_PASSWORD", "evaluator123")
    EVALUATION_TITLE = os.getenv("EVALUATION_TITLE", "평가 시스템")
    UPLOAD_MAX_ROWS = int(os.getenv("UPLOAD_MAX_ROWS", "1000"))
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    SECRET_KEY = "test-secret"
