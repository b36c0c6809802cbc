from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
# covers the plain POST buttons (toggle/delete/logout) as well as FlaskForm posts
csrf = CSRFProtect()
