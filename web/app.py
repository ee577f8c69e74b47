"""
Ideas - HTTP API

A small Flask service accepting idea submissions.

Endpoints:
    GET  /ideas/ping      liveness check, answers "pong"
    POST /ideas/post      polish, translate, augment and commit an idea
    POST /ideas/improve   polish only, nothing is committed

Run with: python -m web.app
"""

import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import requests
from flask import Flask, jsonify, request

from ideas.config import DEBUG, IDEAS_ADDR, LOGIN_VERIFY_URL
from ideas.errors import IdeasError, ValidationError
from ideas.models.idea import IdeaSubmission
from ideas.pipeline import IdeaPipeline, PipelineConfig, PostStatus

logger = logging.getLogger("ideas.web")

app = Flask(__name__)

PUBLIC_PATHS = {"/ideas/ping"}

# Seconds allowed for the login service to verify a token
VERIFY_TIMEOUT = 10


# =============================================================================
# Pipeline
# =============================================================================

_pipeline: Optional[IdeaPipeline] = None


def get_pipeline() -> IdeaPipeline:
    """Get the shared pipeline, configured from the environment."""
    global _pipeline
    if _pipeline is None:
        _pipeline = IdeaPipeline(PipelineConfig.from_env())
    return _pipeline


# =============================================================================
# Request Hooks
# =============================================================================

def read_ip() -> str:
    """Client IP, honouring X-Forwarded-For and X-Real-Ip from a proxy."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    client_ip = forwarded.split(",")[0].strip()
    if not client_ip:
        client_ip = request.headers.get("X-Real-Ip", "").strip()
    return client_ip or request.remote_addr or "unknown"


def verify_token(token: str) -> bool:
    """Ask the login service whether a bearer token is valid."""
    try:
        response = requests.post(
            LOGIN_VERIFY_URL,
            json={"token": token},
            timeout=VERIFY_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Token verification failed: %s", e)
        return False
    return response.status_code == 200


@app.before_request
def authenticate():
    """Require a verified bearer token when a login service is configured."""
    if not LOGIN_VERIFY_URL or request.path in PUBLIC_PATHS:
        return None

    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return jsonify({"ok": False, "message": "unauthorized"}), 401

    if not verify_token(header[len("Bearer "):]):
        return jsonify({"ok": False, "message": "unauthorized"}), 401
    return None


@app.after_request
def log_request(response):
    logger.info("%s %s %s %s", read_ip(), request.method, request.path, response.status_code)
    return response


# =============================================================================
# Routes
# =============================================================================

def _read_submission() -> IdeaSubmission:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("request body must be JSON")
    return IdeaSubmission.from_dict(data)


@app.route("/ideas/ping")
def ping():
    """Liveness check."""
    return "pong\n", 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.route("/ideas/post", methods=["POST"])
def post_idea():
    """Run the full pipeline and commit both language documents."""
    try:
        submission = _read_submission()
    except ValidationError as e:
        return jsonify({"ok": False, "message": str(e)}), 400

    result = get_pipeline().post(submission)

    if result.status is PostStatus.DONE:
        return jsonify(result.to_response())
    return jsonify(result.to_response()), 502


@app.route("/ideas/improve", methods=["POST"])
def improve_idea():
    """Polish an idea without committing anything."""
    try:
        submission = _read_submission()
    except ValidationError as e:
        return jsonify({"ok": False, "message": str(e)}), 400

    try:
        result = get_pipeline().improve(submission)
    except IdeasError as e:
        logger.error("Improve failed: %s", e)
        return jsonify({"ok": False, "message": str(e)}), 502

    return jsonify({
        "ok": True,
        "content": result.polished_content,
        "title": result.polished_title,
        "lang": result.lang.value,
    })


def parse_addr(addr: str) -> tuple[str, int]:
    """Split host:port (host may be empty)."""
    host, _, port = addr.rpartition(":")
    return host or "0.0.0.0", int(port)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host, port = parse_addr(IDEAS_ADDR)
    logger.info("ideas service is serving on %s:%d...", host, port)
    app.run(host=host, port=port, debug=DEBUG)
