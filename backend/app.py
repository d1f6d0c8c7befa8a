from flask import Flask, abort, jsonify, send_from_directory
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from pathlib import Path

# Load environment variables BEFORE reading config
backend_dir = Path(__file__).parent
env_path = backend_dir / '.env'
# Only load .env file if it exists (for local development)
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Also try to load from root directory if not found in backend
root_env_path = backend_dir.parent / '.env'
if root_env_path.exists():
    load_dotenv(dotenv_path=root_env_path)

if not env_path.exists() and not root_env_path.exists():
    # In production, environment variables are set directly
    load_dotenv()

from api.routes import create_api_blueprint
from core.config import Config
from core.logger import logger
from registration.service import utc_timestamp
from sheets.sheets_service import create_sheets_manager

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'X-XSS-Protection': '0',
}


def create_app(config: Config = None, sheets_manager=None) -> Flask:
    """
    Build the Flask application.

    Without arguments, settings come from the environment and the sheets
    manager is chosen by create_sheets_manager().
    """
    if config is None:
        config = Config()
    if sheets_manager is None:
        sheets_manager = create_sheets_manager(config)

    app = Flask(__name__, static_folder=None)
    app.config['APP_CONFIG'] = config
    app.extensions['sheets_manager'] = sheets_manager

    if config.trusted_proxy_hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=config.trusted_proxy_hops)

    CORS(app, origins=config.frontend_origins, supports_credentials=True)

    api = create_api_blueprint(config, sheets_manager)
    app.register_blueprint(api, url_prefix='/api')
    app.extensions['rate_limiter'] = api.rate_limiter

    @app.after_request
    def set_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return {
            'status': 'healthy',
            'timestamp': utc_timestamp(),
            'environment': config.env,
        }, 200

    if config.is_production:
        public_dir = config.frontend_dist_dir

        @app.route('/', defaults={'path': ''}, methods=['GET'])
        @app.route('/<path:path>', methods=['GET'])
        def serve_frontend(path):
            """Serve the built frontend; unknown paths get index.html for client-side routing"""
            if path == 'api' or path.startswith('api/'):
                abort(404)
            if path and (public_dir / path).is_file():
                return send_from_directory(public_dir, path)
            return send_from_directory(public_dir, 'index.html')
    else:
        @app.route('/', methods=['GET'])
        def root():
            """Root endpoint"""
            return {'status': 'ok', 'message': 'Science Fair Registration API'}, 200

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        message = 'Endpoint not found' if e.code == 404 else e.description
        return jsonify({'success': False, 'message': message}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error(f"Unhandled error: {str(e)}", exc_info=True)
        message = str(e) if config.is_development else 'Internal server error'
        return jsonify({'success': False, 'message': message}), 500

    return app


if __name__ == '__main__':
    app_config = Config()
    app = create_app(app_config)
    logger.info(f"Server is running on port {app_config.port} ({app_config.env})")
    app.run(host='0.0.0.0', port=app_config.port, debug=app_config.is_development)
