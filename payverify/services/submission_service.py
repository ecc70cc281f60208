"""
Submission Service
Intake of payment proofs and the admin status lifecycle:
    pending -> verified -> checked_in
    checked_in -> verified   (uncheck)
"""

import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from payverify.errors import ConflictError, NotFoundError, StoreError, ValidationError
from payverify.extensions import db
from payverify.models.submission import Submission, SubmissionStatus
from payverify.services.phone import normalize_phone
from payverify.services.screenshot_storage import get_storage

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please provide your name, phone number, and screenshot."
ALREADY_SUBMITTED = "You have already submitted with this phone number."

PHONE_MAX_LENGTH = Submission.__table__.c.phone.type.length
NAME_MAX_LENGTH = Submission.__table__.c.name.type.length

# Only consulted when STRICT_TRANSITIONS is on.
# Keyed by action: verify and uncheck share a target status but not a source.
VALID_TRANSITIONS = {
    "verify": ({SubmissionStatus.PENDING, SubmissionStatus.VERIFIED}, SubmissionStatus.VERIFIED),
    "checkin": ({SubmissionStatus.VERIFIED, SubmissionStatus.CHECKED_IN}, SubmissionStatus.CHECKED_IN),
    "uncheck": ({SubmissionStatus.CHECKED_IN, SubmissionStatus.VERIFIED}, SubmissionStatus.VERIFIED),
}


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Database commit failed")
        raise StoreError() from e


def get_submission(submission_id):
    submission = db.session.get(Submission, submission_id)
    if submission is None:
        raise NotFoundError()
    return submission


def get_submission_by_phone(phone):
    return Submission.query.filter_by(phone=phone).first()


def list_submissions():
    # Unordered: the console sorts for display
    return Submission.query.all()


def create_submission(name, phone, screenshot):
    """
    Validate, normalize and persist a new submission in the pending state.
    `screenshot` is an uploaded file (werkzeug FileStorage); it is stored
    only after the phone number has passed the duplicate check.
    """
    name = (name or "").strip()
    phone = (phone or "").strip()
    if not name or not phone or screenshot is None or not screenshot.filename:
        raise ValidationError(MISSING_FIELDS)
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters.")

    phone = normalize_phone(phone)
    if len(phone) > PHONE_MAX_LENGTH:
        raise ValidationError("Please provide a valid phone number.")

    if get_submission_by_phone(phone) is not None:
        logger.info("Duplicate submission rejected for %s", phone)
        raise ValidationError(ALREADY_SUBMITTED)

    storage = get_storage()
    image = storage.upload(screenshot)

    submission = Submission(
        name=name,
        phone=phone,
        screenshot=image.url,
        screenshot_public_id=image.public_id,
        status=SubmissionStatus.PENDING,
    )
    db.session.add(submission)
    try:
        db.session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent submission for the same phone
        db.session.rollback()
        logger.info("Duplicate submission rejected by store for %s", phone)
        storage.destroy(image.public_id)
        raise ValidationError(ALREADY_SUBMITTED) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to save submission for %s", phone)
        storage.destroy(image.public_id)
        raise StoreError() from e

    logger.info("Submission %s received from %s", submission.id, phone)
    return submission


def update_status(submission_id, action):
    """
    Apply an admin action (verify, checkin, uncheck) and return the updated record.
    Permissive unless STRICT_TRANSITIONS is enabled, in which case the
    action is rejected with ConflictError when the current status is not
    one of its allowed sources. Repeating an action is always accepted.
    """
    sources, new_status = VALID_TRANSITIONS[action]
    submission = get_submission(submission_id)
    current = submission.status

    if current_app.config.get("STRICT_TRANSITIONS") and current not in sources:
        raise ConflictError(f"Cannot {action} a submission that is {current}")

    submission.status = new_status
    _commit()
    logger.info("Submission %s: %s -> %s (%s)", submission.id, current, new_status, action)
    return submission


def verify_submission(submission_id):
    return update_status(submission_id, "verify")


def check_in_submission(submission_id):
    return update_status(submission_id, "checkin")


def uncheck_submission(submission_id):
    return update_status(submission_id, "uncheck")


def delete_submission(submission_id):
    """Remove the record, then try to remove its screenshot. Returns the deleted record's data."""
    submission = get_submission(submission_id)
    data = submission.to_dict()

    db.session.delete(submission)
    _commit()
    logger.info("Submission %s deleted", submission_id)

    get_storage().destroy(data["screenshot_public_id"])
    return data
