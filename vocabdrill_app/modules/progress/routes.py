# File: vocabdrill_app/modules/progress/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from vocabdrill_app.core.error_handlers import success_response
from vocabdrill_app.utils.time_utils import format_date, study_today
from vocabdrill_app.utils.validation import parse_id_list, validate_payload
from . import progress_bp
from .schemas import RecordStatRequest, SaveProgressRequest
from .services.progress_service import ProgressService


@progress_bp.route('/progress', methods=['GET'])
@login_required
def get_progress():
    """Progress rows of the current user, optionally limited to some semesters."""
    semester_ids = parse_id_list(request.args.get('semesterIds'))
    rows = ProgressService.get_progress(current_user.id, semester_ids)
    return jsonify(success_response(progress=[row.to_dict() for row in rows]))


@progress_bp.route('/progress', methods=['POST'])
@login_required
def save_progress():
    payload = validate_payload(SaveProgressRequest, request.get_json(silent=True))
    saved = ProgressService.save_progress(current_user.id, payload.progress)
    return jsonify(success_response(saved=saved))


@progress_bp.route('/progress', methods=['DELETE'])
@login_required
def reset_progress():
    semester_id = request.args.get('semesterId', type=int)
    deleted = ProgressService.reset_progress(current_user.id, semester_id)
    current_app.logger.info("User %s reset progress (semester=%s)", current_user.username, semester_id)
    return jsonify(success_response(deleted=deleted))


@progress_bp.route('/stats', methods=['GET'])
@login_required
def get_stats():
    rows = ProgressService.get_stats(
        current_user.id,
        year=request.args.get('year'),
        semester_id=request.args.get('semesterId', type=int),
    )
    return jsonify(success_response(stats=[row.to_dict() for row in rows]))


@progress_bp.route('/stats', methods=['POST'])
@login_required
def record_stat():
    payload = validate_payload(RecordStatRequest, request.get_json(silent=True))
    date = payload.date or format_date(
        study_today(
            rollover_hour=current_app.config.get('STUDY_DAY_ROLLOVER_HOUR', 0),
            tz_name=current_app.config.get('STUDY_TIMEZONE', 'UTC'),
        )
    )
    row = ProgressService.record_stat(current_user.id, payload.semester_id, date, payload.kind)
    return jsonify(success_response(data=row.to_dict()))
