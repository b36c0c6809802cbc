"""Create (or reset the password of) an admin account.

Usage: python scripts/create_admin.py [email] [password]
Falls back to ADMIN_EMAIL / ADMIN_PASSWORD from the environment (.env).
"""
import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from panelscore import create_app
from panelscore.extensions import db
from panelscore.models.admin import Admin


def main(argv):
    app = create_app()
    with app.app_context():
        email = argv[1] if len(argv) > 1 else app.config.get('ADMIN_EMAIL')
        password = argv[2] if len(argv) > 2 else app.config.get('ADMIN_PASSWORD')
        if not email or not password:
            print('email and password are required (args or ADMIN_EMAIL/ADMIN_PASSWORD)')
            return 1
        db.create_all()
        admin = Admin.query.filter_by(email=email).first()
        if admin is None:
            admin = Admin(email=email)
            db.session.add(admin)
            action = 'created'
        else:
            action = 'password reset'
        admin.set_password(password)
        db.session.commit()
        app.logger.info('Admin %s: %s', action, email)
        print(f'admin {action}: {email}')
    return 0


if __name__ == '__main__':
    raise SystemExit(main(sys.argv))
