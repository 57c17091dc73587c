"""API routes for creating and querying alerts."""

from flask import Blueprint, jsonify, request, current_app

api_bp = Blueprint("api", __name__)


def _alert_list(alerts):
    return jsonify([a.to_dict() for a in alerts])


@api_bp.route("/alerts", methods=["POST"])
def create_alert():
    """Create an alert and dispatch it to its target service.

    Responds 201 whether or not dispatch succeeded; the status field of
    the returned alert carries the delivery result.
    """
    engine = current_app.alert_engine

    data = request.get_json(silent=True)
    alert = engine.create_alert(data if data is not None else {})

    return jsonify(alert.to_dict()), 201


@api_bp.route("/alerts", methods=["GET"])
def list_alerts():
    """List all alerts."""
    return _alert_list(current_app.alert_engine.get_all_alerts())


@api_bp.route("/alerts/<int:alert_id>", methods=["GET"])
def get_alert(alert_id):
    """Get a single alert by ID."""
    alert = current_app.alert_engine.get_alert(alert_id)
    if not alert:
        return jsonify({"error": "Alert not found"}), 404

    return jsonify(alert.to_dict())


@api_bp.route("/alerts/status/<status>", methods=["GET"])
def list_alerts_by_status(status):
    return _alert_list(current_app.alert_engine.get_alerts_by_status(status))


@api_bp.route("/alerts/service/<service>", methods=["GET"])
def list_alerts_by_service(service):
    return _alert_list(current_app.alert_engine.get_alerts_by_service(service))


@api_bp.route("/alerts/severity/<severity>", methods=["GET"])
def list_alerts_by_severity(severity):
    return _alert_list(current_app.alert_engine.get_alerts_by_severity(severity))


@api_bp.route("/stats", methods=["GET"])
def get_stats():
    """Get alert statistics."""
    return jsonify(current_app.alert_engine.get_stats())
