"""
Flask REST API for the GitHub profile token scanner.

Endpoints:
    POST /api/analyze       - Count tokens across a user's repositories
    GET  /api/analyze       - Usage message
    GET  /api/rate-limit    - Remaining GitHub API quota
    GET  /api/health-check  - Health check
"""

import logging
from typing import Any, Callable, Dict, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from TokenScanner.Business.ProfileAnalyzer import ProfileAnalyzer
from TokenScanner.Exception.GitHubError import GitHubError
from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Routes.validators import status_for_report, validate_analyze_payload
from TokenScanner.Tokenizer.TokenCounter import TokenCounter
from TokenScanner.Utility.config import Settings, load_env_file, resolve_github_token
from TokenScanner.Utility.errors import describe_error, error_kind_for

logger = logging.getLogger(__name__)

AnalyzerFactory = Callable[[Optional[str]], ProfileAnalyzer]


def _default_analyzer_factory(settings: Settings) -> AnalyzerFactory:
    # the tokenizer is loaded once and shared between requests
    counter: Dict[str, TokenCounter] = {}

    def factory(token: Optional[str]) -> ProfileAnalyzer:
        # a tokenizer that failed to load is retried on the next request
        if "default" not in counter or not counter["default"].is_available:
            counter["default"] = TokenCounter()
        client = GitHubClient(token=token, api_root=settings.api_root, timeout=settings.request_timeout)
        return ProfileAnalyzer(client, counter=counter["default"])

    return factory


"""Create and configure the Flask application.
    Args:
        config: Optional configuration overrides (SETTINGS, ANALYZER_FACTORY, ...)
    Returns:
        Flask application instance
"""
def CreateApp(config: Optional[Dict[str, Any]] = None) -> Flask:

    app = Flask(__name__)
    load_env_file()
    settings = Settings.from_env()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app.config["SETTINGS"] = settings
    app.config.update(config or {})
    app.config.setdefault("ANALYZER_FACTORY", _default_analyzer_factory(app.config["SETTINGS"]))
    CORS(app)
    RegisterRoutes(app)
    return app


"""Register all API routes.
    Args:
        app: Flask application instance
"""
def RegisterRoutes(app: Flask) -> None:

    @app.route("/")
    def index():
        return "App is running!"

    @app.route('/api/health-check', methods=['GET'])
    def HealthCheck():
        return jsonify({
            "status": "healthy",
            "message": "GitHub Repository Analyzer API is running"
        }), 200

    @app.route('/api/analyze', methods=['GET'])
    def AnalyzeUsage():
        return jsonify({
            "message": "GitHub Repository Analyzer API",
            "usage": 'POST /api/analyze with { "username": "github_username", "minTokens": 1000000 }'
        }), 200

    """Analyze a GitHub profile.
        Request JSON body:
        {
            "username": "octocat",            # Required, username or profile URL
            "minTokens": 1000000,             # Optional, default 1000000
            "githubToken": "ghp_..."          # Optional, falls back to GITHUB_TOKEN
        }
        Returns:
            The profile report, with "error" set when the analysis failed
    """
    @app.route('/api/analyze', methods=['POST'])
    def AnalyzeProfileEndpoint():
        data = request.get_json(silent=True) or {}
        try:
            username, min_tokens, github_token = validate_analyze_payload(data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            settings: Settings = current_app.config["SETTINGS"]
            token = resolve_github_token(github_token, settings)
            analyzer = current_app.config["ANALYZER_FACTORY"](token)
            logger.info("Analyzing profile: %s (minTokens=%d)", username, min_tokens)
            report = analyzer.analyze_profile(username, min_tokens).to_dict()
        except Exception as e:
            logger.exception("Analysis error: %s", e)
            return jsonify({"error": "Failed to analyze GitHub profile"}), 500

        if report.get("error"):
            logger.info("Analysis of %s ended with %s: %s", username, report.get("error_kind"), report["error"])
        return jsonify(report), status_for_report(report)

    @app.route('/api/rate-limit', methods=['GET'])
    def RateLimit():
        settings: Settings = current_app.config["SETTINGS"]
        token = resolve_github_token(request.headers.get("X-GitHub-Token"), settings)
        client = GitHubClient(token=token, api_root=settings.api_root, timeout=settings.request_timeout)
        try:
            core = client.rate_limit()
        except GitHubError as e:
            logger.error("GitHub API error: %s", e.message)
            return jsonify({"error": describe_error(e.message), "error_kind": error_kind_for(e)}), e.status_code
        return jsonify({"authenticated": client.authenticated, "rate": core}), 200

    @app.errorhandler(404)
    def NotFound(error):
        return jsonify({
            "error": "not_found",
            "message": "Endpoint not found. Try GET /api/health-check or POST /api/analyze"
        }), 404

    @app.errorhandler(405)
    def MethodNotAllowed(error):
        return jsonify({
            "error": "method_not_allowed",
            "message": "Method not allowed for this endpoint"
        }), 405
