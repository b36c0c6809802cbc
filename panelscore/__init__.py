from flask import Flask, render_template
from sqlalchemy.exc import SQLAlchemyError
from .extensions import db, login_manager, migrate, csrf


def create_app(config_object='config.Config'):
    """App factory.

    ``config_object`` is an import path or class; tests pass ``config.TestConfig``.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    login_manager.login_view = 'auth.evaluator_login'

    # ids are "<role>:<pk>" so admins and evaluators share one loader
    @login_manager.user_loader
    def load_user(user_id):
        from .models.admin import Admin
        from .models.evaluator import Evaluator
        role, _, pk = (user_id or '').partition(':')
        if not pk.isdigit():
            return None
        if role == 'admin':
            return db.session.get(Admin, int(pk))
        if role == 'evaluator':
            ev = db.session.get(Evaluator, int(pk))
            # deactivated evaluators lose their session on the next request
            return ev if ev is not None and ev.is_active else None
        return None

    from .session import load_session, current_session
    app.before_request(load_session)

    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from .blueprints.candidates import bp as candidates_bp
    app.register_blueprint(candidates_bp, url_prefix="/admin/candidates")

    from .blueprints.evaluators import bp as evaluators_bp
    app.register_blueprint(evaluators_bp, url_prefix="/admin/evaluators")

    from .blueprints.rubric import bp as rubric_bp
    app.register_blueprint(rubric_bp, url_prefix="/admin/items")

    from .blueprints.results import bp as results_bp
    app.register_blueprint(results_bp, url_prefix="/admin/results")

    from .blueprints.settings import bp as settings_bp
    app.register_blueprint(settings_bp, url_prefix="/admin/settings")

    from .blueprints.evaluator import bp as evaluator_bp
    app.register_blueprint(evaluator_bp, url_prefix="/evaluator")

    @app.context_processor
    def inject_globals():
        from .services.settings import evaluation_title
        try:
            title = evaluation_title()
        except SQLAlchemyError:
            db.session.rollback()
            app.logger.exception('Loading system title failed')
            title = app.config.get('EVALUATION_TITLE')
        return {'system_title': title, 'session_info': current_session()}

    @app.errorhandler(404)
    def not_found(e):
        return render_template('errors/404.html'), 404

    @app.get('/')
    def index():
        return render_template('home.html')

    @app.get('/results')
    def public_results():
        """Public ranking view; same numbers as the admin results page."""
        from .services import gateway
        from .services.aggregation import compute_results
        results = compute_results(
            gateway.fetch_candidates(),
            gateway.fetch_evaluators(),
            gateway.fetch_items(),
            gateway.fetch_final_scores(),
        )
        return render_template('results_public.html', results=results)

    from .utils.decorators import admin_required

    @app.get('/admin/')
    @admin_required
    def admin_dashboard():
        from .services import gateway
        from .services.aggregation import compute_results, summary_stats
        evaluators = gateway.fetch_evaluators()
        items = gateway.fetch_items()
        results = compute_results(gateway.fetch_candidates(), evaluators, items, gateway.fetch_final_scores())
        stats = summary_stats(results, evaluators, items)
        return render_template('admin/dashboard.html', stats=stats, top=results[:5])

    return app
