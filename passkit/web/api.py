"""
passkit.web.api
Flask application exposing the generator and the strength evaluator.

GET  /api/password            one password, options from the query string
POST /api/passwords           several passwords, options + count from the body
POST /api/password/validate   strength report for a supplied password
"""

import logging
from typing import Any, Dict, Mapping, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .. import __version__
from ..config import DEFAULTS
from ..errors import InvalidJson, MissingPassword, PasskitError, RandomSourceError
from ..evaluator import evaluate
from ..generator import generate, generate_many
from .params import parse_count, parse_generation_options, parse_requirements

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Accept"]


def _error(status: int, payload: Dict[str, Any]):
    body = {"success": False, "error": {"code": status, **payload}}
    return jsonify(body), status


def _body() -> Dict[str, Any]:
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            raise InvalidJson("request body is not valid JSON")
        if not isinstance(data, dict):
            raise InvalidJson("request body must be a JSON object")
        return data
    return request.form.to_dict()


def _rng():
    return current_app.config.get("PASSKIT_RANDOM_SOURCE")


def _cors_origins(value: Any):
    if isinstance(value, str):
        origins = [o.strip() for o in value.split(",") if o.strip()]
        return "*" if origins in ([], ["*"]) else origins
    return list(value)


def create_app(settings: Optional[Mapping[str, Any]] = None) -> Flask:
    cfg = DEFAULTS.copy()
    cfg.update(settings or {})

    app = Flask(__name__)
    app.config["PASSKIT"] = cfg
    app.config["PASSKIT_RANDOM_SOURCE"] = None
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    CORS(
        app,
        resources={r"/*": {"origins": _cors_origins(cfg["cors_origins"])}},
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        send_wildcard=True,
    )

    @app.route("/")
    def home():
        return jsonify({"success": True, "service": "passkit", "version": __version__})

    @app.route("/api/password", methods=["GET"])
    def generate_route():
        options = parse_generation_options(request.args)
        password = generate(options, _rng())
        return jsonify({"success": True, "password": password, "options": options.to_dict()})

    @app.route("/api/passwords", methods=["POST"])
    def generate_many_route():
        data = _body()
        options = parse_generation_options(data)
        count = parse_count(data)
        passwords = generate_many(count, options, _rng())
        echoed = options.to_dict()
        echoed["count"] = count
        return jsonify({
            "success": True,
            "count": len(passwords),
            "passwords": passwords,
            "options": echoed,
        }), 201

    @app.route("/api/password/validate", methods=["POST"])
    def validate_route():
        data = _body()
        password = data.get("password")
        if not isinstance(password, str) or not password:
            raise MissingPassword('"password" is required and must be a non-empty string')
        requirements = parse_requirements(data.get("requirements"))
        report = evaluate(password, requirements)
        return jsonify({"success": True, "result": report.to_dict()})

    @app.errorhandler(PasskitError)
    def handle_passkit_error(e: PasskitError):
        if isinstance(e, RandomSourceError):
            logger.error("random source failure on %s %s", request.method, request.path, exc_info=e)
            return _error(500, {"type": "InternalError", "message": "internal server error"})
        logger.info("rejected %s %s: %s", request.method, request.path, e.code)
        return _error(400, e.to_dict())

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404:
            payload = {"type": "NotFound", "message": f"route {request.path} not found"}
        elif e.code == 405:
            payload = {
                "type": "MethodNotAllowed",
                "message": f"method {request.method} not allowed for {request.path}",
            }
        else:
            payload = {"type": type(e).__name__, "message": e.description}
        return _error(e.code or 500, payload)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return _error(500, {"type": "InternalError", "message": "internal server error"})

    return app
