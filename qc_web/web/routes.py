## routes.py
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, render_template, request

from qc_web.domain.errors import CheckAlreadyRunning
from qc_web.web.controller import CheckController


def _entry_id_from(raw: str | None) -> str:
    return (raw or "").strip()


def create_blueprint(controller: CheckController) -> Blueprint:
    bp = Blueprint("web", __name__)

    @bp.get("/")
    def index():
        entry_id = _entry_id_from(request.args.get("entry_id"))
        if not entry_id:
            return render_template("index.html", entry_id="", state=None, error=None)

        return render_template("index.html", entry_id=entry_id, state=controller.state(entry_id), error=None)

    @bp.post("/check")
    def run_check():
        entry_id = _entry_id_from(request.form.get("entry_id"))
        if not entry_id:
            return render_template("index.html", entry_id="", state=None, error="Entry id is required."), 400

        try:
            state, outcome = controller.run(entry_id)
        except CheckAlreadyRunning as e:
            current_app.logger.info("Rejected check for %s: already running", entry_id)
            return render_template("index.html", entry_id=entry_id, state=controller.state(entry_id), error=str(e)), 409

        code = 200 if outcome is not None else 500
        current_app.logger.info("Check for entry %s status=%s", entry_id, "ok" if outcome else "failed")
        return render_template("index.html", entry_id=entry_id, state=state, error=None), code

    @bp.post("/api/entries/<entry_id>/check")
    def api_run_check(entry_id: str):
        try:
            state, outcome = controller.run(entry_id)
        except CheckAlreadyRunning as e:
            return jsonify(status="running", error=str(e)), 409

        if outcome is None:
            return jsonify(status="failed", error=str(state.results)), 500

        return jsonify(
            status="ok",
            entry_id=outcome.entry_id,
            summary=outcome.report.summary,
            readability_score=outcome.report.readability_score,
            passed_readability=outcome.report.passed_readability,
            html=str(state.results),
        )

    @bp.get("/api/entries/<entry_id>/state")
    def api_state(entry_id: str):
        state = controller.state(entry_id)
        return jsonify(running=state.running, results=str(state.results))

    return bp
