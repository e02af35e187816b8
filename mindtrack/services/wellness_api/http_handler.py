"""Wellness API HTTP handler - Flask adapter over the platform services.

The caller's identity comes from the X-Principal-Id header and is passed
through to the services unchanged; the core never sees credentials.

Status codes reproduce the operation error contract:
    INVALID_INPUT  -> 400
    NOT_AUTHORIZED -> 401
    NOT_FOUND      -> 404

Reads answer 200 {"record": {...}} or 404 {"record": null}; a record owned by
someone else is indistinguishable from a missing one.
"""
import logging
import os
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest, Unauthorized

from mindtrack.platform import WellnessPlatform
from mindtrack.services.risk_engine import ENGINE_VERSION
from mindtrack.shared.models import InterventionLevel, OperationResult

logger = logging.getLogger(__name__)

PRINCIPAL_HEADER = "X-Principal-Id"


def to_json_value(value: Any) -> Any:
    """Convert records, enums, dates and tuples into JSON-safe values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {k: to_json_value(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, InterventionLevel):
        return int(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def result_response(result: OperationResult):
    """Render an OperationResult.

    Success: 200 {"value": ..., "intervention_triggered": bool}
    Failure: <code> {"error": <code>}
    """
    if not result.ok:
        return jsonify({"error": int(result.error)}), int(result.error)
    return jsonify({
        "value": to_json_value(result.value),
        "intervention_triggered": isinstance(result.value, InterventionLevel),
    }), 200


def record_response(record: Optional[Any]):
    if record is None:
        return jsonify({"record": None}), 404
    return jsonify({"record": to_json_value(record)}), 200


def current_principal() -> str:
    principal = request.headers.get(PRINCIPAL_HEADER, "").strip()
    if not principal:
        raise Unauthorized(f"Missing {PRINCIPAL_HEADER} header")
    return principal


def json_body(*required: str) -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body required")
    missing = [name for name in required if name not in data]
    if missing:
        raise BadRequest(f"Missing fields: {', '.join(missing)}")
    return data


def create_app(platform: Optional[WellnessPlatform] = None) -> Flask:
    """Build the Flask app.

    Args:
        platform: Services to expose (defaults to a platform configured
            from the environment)
    """
    app = Flask(__name__)
    platform = platform or WellnessPlatform()
    app.config["PLATFORM"] = platform

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        logger.warning("WELLNESS_API_BAD_REQUEST", extra={"path": request.path})
        return jsonify({"error": 400, "detail": error.description}), 400

    @app.errorhandler(Unauthorized)
    def handle_unauthorized(error: Unauthorized):
        logger.warning("WELLNESS_API_MISSING_PRINCIPAL", extra={"path": request.path})
        return jsonify({"error": 401, "detail": error.description}), 401

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "healthy",
            "service": "wellness-api",
            "risk_engine_version": ENGINE_VERSION,
        }), 200

    @app.route("/ready", methods=["GET"])
    def ready():
        return jsonify({"status": "ready"}), 200

    @app.route("/counters", methods=["GET"])
    def counters():
        return jsonify(platform.counters()), 200

    # ---------- Mood entries & insights ----------

    @app.route("/mood-entries", methods=["POST"])
    def log_mood_entry():
        caller = current_principal()
        data = json_body(
            "mood_score", "energy_level", "stress_level", "anxiety_level",
            "sleep_quality", "social_interaction", "physical_activity",
        )
        return result_response(platform.mood_entries.log_mood_entry(
            caller,
            mood_score=data["mood_score"],
            energy_level=data["energy_level"],
            stress_level=data["stress_level"],
            anxiety_level=data["anxiety_level"],
            sleep_quality=data["sleep_quality"],
            social_interaction=data["social_interaction"],
            physical_activity=data["physical_activity"],
            notes=data.get("notes", ""),
            triggers=data.get("triggers", []),
            activities=data.get("activities", []),
            medications=data.get("medications", []),
        ))

    @app.route("/mood-entries/<int:entry_id>", methods=["GET"])
    def get_mood_entry(entry_id: int):
        return record_response(platform.mood_entries.get_mood_entry(current_principal(), entry_id))

    @app.route("/mood-insights", methods=["POST"])
    def generate_mood_insight():
        caller = current_principal()
        data = json_body("entry_ids")
        return result_response(platform.insights.generate_mood_insight(
            caller, data["entry_ids"]
        ))

    @app.route("/mood-insights/<int:insight_id>", methods=["GET"])
    def get_mood_insight(insight_id: int):
        return record_response(platform.insights.get_mood_insight(current_principal(), insight_id))

    # ---------- Wellness goals ----------

    @app.route("/goals", methods=["POST"])
    def create_wellness_goal():
        caller = current_principal()
        data = json_body("name", "target_value", "target_date")
        return result_response(platform.goals.create_wellness_goal(
            caller,
            name=data["name"],
            target_value=data["target_value"],
            target_date=data["target_date"],
            milestones=data.get("milestones", []),
        ))

    @app.route("/goals/<int:goal_id>/progress", methods=["POST"])
    def update_goal_progress(goal_id: int):
        caller = current_principal()
        data = json_body("progress")
        return result_response(platform.goals.update_goal_progress(
            caller, goal_id, data["progress"]
        ))

    @app.route("/goals/<int:goal_id>", methods=["GET"])
    def get_wellness_goal(goal_id: int):
        return record_response(platform.goals.get_wellness_goal(current_principal(), goal_id))

    # ---------- Crisis support plan ----------

    @app.route("/crisis-plan", methods=["PUT"])
    def update_crisis_support_plan():
        caller = current_principal()
        data = json_body("plan_text")
        return result_response(platform.crisis_plans.update_crisis_support_plan(
            caller,
            emergency_contacts=data.get("emergency_contacts", []),
            hotlines=data.get("hotlines", []),
            plan_text=data["plan_text"],
            support_network=data.get("support_network", []),
        ))

    @app.route("/crisis-plan/risk-level", methods=["PUT"])
    def update_crisis_risk_level():
        caller = current_principal()
        data = json_body("risk_level")
        return result_response(platform.crisis_plans.update_crisis_risk_level(
            caller, data["risk_level"]
        ))

    @app.route("/crisis-plan", methods=["GET"])
    def get_crisis_support_plan():
        return record_response(platform.crisis_plans.get_crisis_support_plan(current_principal()))

    # ---------- Therapy sessions & conversations ----------

    @app.route("/sessions", methods=["POST"])
    def start_therapy_session():
        caller = current_principal()
        data = json_body("topic", "mood_before", "modality")
        return result_response(platform.sessions.start_therapy_session(
            caller, data["topic"], data["mood_before"], data["modality"]
        ))

    @app.route("/sessions/<int:session_id>/end", methods=["POST"])
    def end_therapy_session(session_id: int):
        caller = current_principal()
        data = json_body("mood_after", "rating")
        return result_response(platform.sessions.end_therapy_session(
            caller,
            session_id,
            mood_after=data["mood_after"],
            topics_discussed=data.get("topics_discussed", []),
            progress_notes=data.get("progress_notes", ""),
            homework=data.get("homework", ""),
            rating=data["rating"],
        ))

    @app.route("/sessions/<int:session_id>", methods=["GET"])
    def get_therapy_session(session_id: int):
        return record_response(platform.sessions.get_therapy_session(current_principal(), session_id))

    @app.route("/sessions/<int:session_id>/conversations", methods=["POST"])
    def log_conversation(session_id: int):
        caller = current_principal()
        data = json_body("user_input")
        return result_response(platform.sessions.log_conversation(
            caller,
            session_id,
            user_input=data["user_input"],
            bot_response=data.get("bot_response", ""),
            context=data.get("context", ""),
            technique=data.get("technique", ""),
            sentiment=data.get("sentiment", ""),
        ))

    @app.route("/sessions/<int:session_id>/conversations/<int:conversation_id>", methods=["GET"])
    def get_conversation(session_id: int, conversation_id: int):
        return record_response(platform.sessions.get_conversation(
            current_principal(), session_id, conversation_id
        ))

    # ---------- Assessments ----------

    @app.route("/assessments", methods=["POST"])
    def conduct_assessment():
        caller = current_principal()
        data = json_body("instrument", "questions_answered", "total_questions", "raw_score")
        return result_response(platform.assessments.conduct_assessment(
            caller,
            data["instrument"],
            data["questions_answered"],
            data["total_questions"],
            data["raw_score"],
        ))

    @app.route("/assessments/<int:assessment_id>", methods=["GET"])
    def get_assessment(assessment_id: int):
        return record_response(platform.assessments.get_assessment(current_principal(), assessment_id))

    # ---------- Progress tracking ----------

    @app.route("/progress/check-in", methods=["POST"])
    def update_progress_tracking():
        return result_response(platform.progress.update_progress_tracking(current_principal()))

    @app.route("/progress/coping-strategies", methods=["POST"])
    def learn_coping_strategy():
        caller = current_principal()
        data = json_body("strategy")
        return result_response(platform.progress.learn_coping_strategy(
            caller, data["strategy"]
        ))

    @app.route("/progress", methods=["GET"])
    def get_progress_tracking():
        return record_response(platform.progress.get_progress_tracking(current_principal()))

    @app.route("/progress/statistics", methods=["GET"])
    def get_session_statistics():
        return record_response(platform.progress.get_session_statistics(current_principal()))

    # ---------- Crisis interventions ----------

    @app.route("/crisis-interventions", methods=["POST"])
    def trigger_crisis_intervention():
        caller = current_principal()
        data = json_body("trigger_reason", "risk_label")
        return result_response(platform.interventions.trigger_crisis_intervention(
            caller, data["trigger_reason"], data["risk_label"]
        ))

    @app.route("/crisis-interventions/<int:level>", methods=["GET"])
    def get_crisis_intervention(level: int):
        return record_response(platform.interventions.get_crisis_intervention(current_principal(), level))

    # ---------- Therapeutic resources ----------

    @app.route("/resources", methods=["POST"])
    def add_therapeutic_resource():
        caller = current_principal()
        data = json_body("category", "name", "effectiveness_rating")
        return result_response(platform.resources.add_therapeutic_resource(
            caller,
            category=data["category"],
            name=data["name"],
            description=data.get("description", ""),
            tag=data.get("tag", ""),
            effectiveness_rating=data["effectiveness_rating"],
            difficulty=data.get("difficulty", ""),
            applies_to=data.get("applies_to", []),
        ))

    @app.route("/resources/<category>/<int:resource_id>", methods=["GET"])
    def get_therapeutic_resource(category: str, resource_id: int):
        return record_response(platform.resources.get_therapeutic_resource(category, resource_id))

    # ---------- Anonymous research ----------

    @app.route("/research/contributions", methods=["POST"])
    def contribute_anonymous_data():
        caller = current_principal()
        data = json_body("score", "period")
        return result_response(platform.research.contribute_anonymous_data(
            caller, data["score"], data["period"]
        ))

    @app.route("/research/stats/<period>", methods=["GET"])
    def get_anonymous_stats(period: str):
        return record_response(platform.research.get_anonymous_stats(period))

    logger.info("WELLNESS_API_INITIALIZED", extra={"route_count": len(list(app.url_map.iter_rules()))})
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    port = int(os.getenv("PORT", "8080"))
    create_app().run(host="0.0.0.0", port=port, debug=False)
