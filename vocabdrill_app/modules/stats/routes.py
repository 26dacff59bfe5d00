# File: vocabdrill_app/modules/stats/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from vocabdrill_app.core.error_handlers import success_response
from vocabdrill_app.utils.time_utils import format_date, study_today
from vocabdrill_app.utils.validation import parse_id_list
from . import stats_bp
from .services.dashboard_service import DashboardService


@stats_bp.route('/dashboard', methods=['GET'])
@login_required
def dashboard():
    semester_ids = parse_id_list(request.args.get('semesterIds'))
    overview = DashboardService.get_overview(
        current_user.id,
        semester_ids,
        hard_threshold=current_app.config.get('HARD_WORD_FAILURES', 3),
        rollover_hour=current_app.config.get('STUDY_DAY_ROLLOVER_HOUR', 0),
    )
    today = format_date(study_today(
        rollover_hour=current_app.config.get('STUDY_DAY_ROLLOVER_HOUR', 0),
        tz_name=current_app.config.get('STUDY_TIMEZONE', 'UTC'),
    ))
    return jsonify(success_response(
        overall=overview['overall'],
        semesters={str(sid): counts for sid, counts in overview['semesters'].items()},
        today=DashboardService.get_today(current_user.id, today),
        date=today,
    ))


@stats_bp.route('/dashboard/hard-words', methods=['GET'])
@login_required
def hard_words():
    words = DashboardService.get_hard_words(
        current_user.id,
        parse_id_list(request.args.get('semesterIds')),
        hard_threshold=current_app.config.get('HARD_WORD_FAILURES', 3),
    )
    return jsonify(success_response(words=words))
