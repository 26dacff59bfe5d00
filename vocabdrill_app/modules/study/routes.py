# File: vocabdrill_app/modules/study/routes.py
from flask import jsonify, request
from flask_login import current_user, login_required

from vocabdrill_app.core.error_handlers import success_response
from vocabdrill_app.utils.validation import validate_payload
from . import study_bp
from .logics.drill_machine import EVENT_LEARN, EVENT_NEXT, EVENT_QUIZ, EVENT_SPELL
from .schemas import QuizAnswer, SpellingAnswer, StartSessionRequest
from .services.session_controller import StudySessionController


@study_bp.route('/start', methods=['POST'])
@login_required
def start_session():
    payload = validate_payload(StartSessionRequest, request.get_json(silent=True), 'Select at least one semester')
    controller = StudySessionController(current_user.id)
    view = controller.start(payload.semester_ids, payload.kind, payload.daily_limit)
    return jsonify(success_response(**view))


@study_bp.route('/current', methods=['GET'])
@login_required
def current_session():
    return jsonify(success_response(**StudySessionController(current_user.id).current()))


@study_bp.route('/learn', methods=['POST'])
@login_required
def acknowledge_learn():
    view = StudySessionController(current_user.id).handle(EVENT_LEARN)
    return jsonify(success_response(**view))


@study_bp.route('/quiz', methods=['POST'])
@login_required
def answer_quiz():
    payload = validate_payload(QuizAnswer, request.get_json(silent=True) or {})
    view = StudySessionController(current_user.id).handle(EVENT_QUIZ, {'choice': payload.choice})
    return jsonify(success_response(**view))


@study_bp.route('/spell', methods=['POST'])
@login_required
def answer_spelling():
    payload = validate_payload(SpellingAnswer, request.get_json(silent=True) or {})
    view = StudySessionController(current_user.id).handle(EVENT_SPELL, {'answer': payload.answer})
    return jsonify(success_response(**view))


@study_bp.route('/next', methods=['POST'])
@login_required
def advance():
    view = StudySessionController(current_user.id).handle(EVENT_NEXT)
    return jsonify(success_response(**view))


@study_bp.route('/exit', methods=['POST'])
@login_required
def exit_session():
    return jsonify(success_response(**StudySessionController(current_user.id).exit()))
