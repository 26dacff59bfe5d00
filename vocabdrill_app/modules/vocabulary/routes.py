# File: vocabdrill_app/modules/vocabulary/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import func

from vocabdrill_app.core.error_handlers import ValidationError, success_response
from vocabdrill_app.core.seeds import seed_sample_data
from vocabdrill_app.extensions import db
from vocabdrill_app.models import VocabWord
from vocabdrill_app.utils.time_utils import utcnow
from vocabdrill_app.utils.validation import validate_payload
from ..auth.decorators import admin_required
from . import vocabulary_bp
from .schemas import ImportRequest, SemesterCreate
from .services.import_service import read_word_file
from .services.vocabulary_service import VocabularyService


@vocabulary_bp.route('/ping', methods=['GET'])
def ping():
    return jsonify(success_response(status='ok', time=utcnow().isoformat()))


@vocabulary_bp.route('/semesters', methods=['GET'])
def list_semesters():
    from ..study.services.study_store import SqlStudyStore

    semesters = SqlStudyStore().get_semesters()
    counts = dict(
        db.session.query(VocabWord.semester_id, func.count(VocabWord.id))
        .group_by(VocabWord.semester_id)
        .all()
    )
    data = []
    for semester in semesters:
        item = semester.to_dict()
        item['word_count'] = counts.get(semester.id, 0)
        data.append(item)
    return jsonify(success_response(semesters=data))


@vocabulary_bp.route('/vocab/<int:semester_id>', methods=['GET'])
@login_required
def list_words(semester_id):
    semester = VocabularyService.get_semester(semester_id)
    words = VocabularyService.get_words(semester_id)
    return jsonify(success_response(semester=semester.to_dict(), words=[w.to_dict() for w in words]))


# === Admin ===

@vocabulary_bp.route('/admin/semesters', methods=['POST'])
@admin_required
def create_semester():
    payload = validate_payload(SemesterCreate, request.get_json(silent=True))
    semester = VocabularyService.create_semester(
        payload.name, payload.slug, payload.description, payload.order
    )
    return jsonify(success_response(semester=semester.to_dict())), 201


@vocabulary_bp.route('/admin/vocab', methods=['POST'])
@admin_required
def import_vocab():
    payload = validate_payload(ImportRequest, request.get_json(silent=True), 'Import needs semesterId and words')
    result = VocabularyService.import_words(
        payload.semester_id,
        payload.words,
        clear_existing=payload.clear_existing,
        user_id=current_user.id,
    )
    return jsonify(success_response(**result))


@vocabulary_bp.route('/admin/vocab/upload', methods=['POST'])
@admin_required
def upload_vocab():
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        raise ValidationError('No file uploaded')
    semester_id = request.form.get('semesterId', type=int)
    if semester_id is None:
        raise ValidationError('semesterId is required')
    clear_existing = request.form.get('clearExisting', '').lower() in ('1', 'true', 'yes', 'on')

    try:
        records = read_word_file(upload.stream, upload.filename)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    result = VocabularyService.import_words(
        semester_id, records, clear_existing=clear_existing, user_id=current_user.id
    )
    return jsonify(success_response(**result))


@vocabulary_bp.route('/admin/vocab', methods=['DELETE'])
@admin_required
def delete_semester_words():
    semester_id = request.args.get('semesterId', type=int)
    if semester_id is None:
        raise ValidationError('semesterId is required')
    deleted = VocabularyService.delete_semester_words(semester_id)
    return jsonify(success_response(deleted=deleted))


@vocabulary_bp.route('/admin/vocab/word/<int:word_id>', methods=['DELETE'])
@admin_required
def delete_word(word_id):
    VocabularyService.delete_word(word_id)
    return jsonify(success_response(message='Word deleted'))


@vocabulary_bp.route('/init-data', methods=['POST'])
@admin_required
def init_data():
    """Seed the sample semesters when the database has none."""
    result = seed_sample_data()
    current_app.logger.info("Sample data requested by %s: %s", current_user.username, result)
    return jsonify(success_response(**result))
