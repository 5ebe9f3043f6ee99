from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.middleware.proxy_fix import ProxyFix
from config.settings import Config
from routes.auth import auth_bp
from routes.chat import chat_bp
from routes.plans import plans_bp
from routes.report import report_bp
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config_overrides=None):
    app = Flask(__name__)

    CORS(
        app,
        origins=Config.CORS_ORIGINS,
        methods=Config.CORS_METHODS,
        allow_headers=[
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        supports_credentials=True  # Allows sending cookies and auth headers
    )

    app.config["JWT_SECRET_KEY"] = Config.JWT_SECRET_KEY
    if config_overrides:
        app.config.update(config_overrides)

    JWTManager(app)

    if Config.TRUSTED_PROXY_COUNT > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=Config.TRUSTED_PROXY_COUNT)

    @app.route('/')
    def home():
        return jsonify({"message": "Advisor AI backend is running!"})

    # Register Blueprints
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(chat_bp, url_prefix='/chat')
    app.register_blueprint(report_bp, url_prefix='/report')
    app.register_blueprint(plans_bp, url_prefix='/get')

    logger.info("Advisor AI app created")
    return app


app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8000, debug=Config.FLASK_DEBUG)
