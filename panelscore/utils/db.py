from flask import current_app, flash
from sqlalchemy.exc import SQLAlchemyError
from ..extensions import db


def commit_or_flash(success_msg, failure_msg="저장에 실패했습니다."):
    """Commit the session; on failure roll back, log and flash a generic error.

    Returns True when the commit went through.
    """
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(failure_msg)
        flash(failure_msg, "danger")
        return False
    if success_msg:
        flash(success_msg, "success")
    return True
