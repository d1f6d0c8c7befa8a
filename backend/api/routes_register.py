"""
Public registration routes backed by Google Sheets.
"""
from typing import Optional

from flask import Blueprint, jsonify, request

from core.logger import logger
from core.rate_limit import RateLimiter, rate_limited
from registration.service import submit_registration
from registration.validators import ValidationError, validate_registration

REGISTRATION_FAILED_MESSAGE = (
    'An error occurred while processing your registration. Please try again later.'
)


def register_registration_routes(
    api: Blueprint,
    sheets_manager: Optional[object],
    limiter: RateLimiter,
) -> None:
    """Register registration, teacher list and metadata routes on the given blueprint."""

    @api.route("/register", methods=["POST"])
    @rate_limited(limiter)
    def register():
        """Validate a registration and append it to the spreadsheet."""
        try:
            data = validate_registration(request.get_json(silent=True))
        except ValidationError as e:
            logger.info(f"Registration rejected: {str(e)}")
            return jsonify({"success": False, "errors": e.errors}), 400

        try:
            if not sheets_manager:
                raise RuntimeError("Google Sheets manager not configured")

            result = submit_registration(data, sheets_manager)
            return (
                jsonify(
                    {
                        "success": True,
                        "projectId": result.project_id,
                        "timestamp": result.timestamp,
                        "message": "Registration successful",
                    }
                ),
                201,
            )
        except Exception as e:
            logger.error(f"Registration failed: {str(e)}", exc_info=True)
            return jsonify({"success": False, "message": REGISTRATION_FAILED_MESSAGE}), 500

    @api.route("/teachers", methods=["GET"])
    def get_teachers():
        """Teacher list for the form's dropdown."""
        try:
            if not sheets_manager:
                raise RuntimeError("Google Sheets manager not configured")
            teachers = sheets_manager.get_teachers()
            return jsonify({"success": True, "teachers": teachers}), 200
        except Exception as e:
            logger.error(f"Error fetching teachers: {str(e)}", exc_info=True)
            return jsonify({"success": False, "message": "Failed to fetch teachers list"}), 500

    @api.route("/metadata", methods=["GET"])
    def get_metadata():
        """School name, contact and fair dates."""
        try:
            if not sheets_manager:
                raise RuntimeError("Google Sheets manager not configured")
            metadata = sheets_manager.get_fair_metadata()
            return jsonify({"success": True, **metadata}), 200
        except Exception as e:
            logger.error(f"Error fetching fair metadata: {str(e)}", exc_info=True)
            return jsonify({"success": False, "message": "Failed to fetch fair metadata"}), 500
