from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from payverify.services.submission_service import (
    check_in_submission,
    create_submission,
    delete_submission,
    list_submissions,
    uncheck_submission,
    verify_submission,
)

submissions_bp = Blueprint('submissions', __name__)


def _ok(message, data, status=200):
    return jsonify({'success': True, 'message': message, 'data': data}), status


@submissions_bp.route('/submit', methods=['POST'])
def submit():
    """
    Submit a payment screenshot
    ---
    tags:
      - Submissions
    consumes:
      - multipart/form-data
    parameters:
      - in: formData
        name: name
        type: string
        required: true
      - in: formData
        name: phone
        type: string
        required: true
      - in: formData
        name: screenshot
        type: file
        required: true
        description: jpg, jpeg or png
    responses:
      201:
        description: Submission created in the pending state
      400:
        description: Missing fields, unsupported image, or phone already submitted
      500:
        description: Upload or database failure
    """
    submission = create_submission(
        name=request.form.get('name'),
        phone=request.form.get('phone'),
        screenshot=request.files.get('screenshot'),
    )
    return _ok('Payment submitted successfully.', submission.to_dict(), 201)


@submissions_bp.route('/submissions', methods=['GET'])
@jwt_required()
def get_submissions():
    """
    List all submissions
    ---
    tags:
      - Submissions
    security:
      - Bearer: []
    responses:
      200:
        description: All submissions (unsorted)
      401:
        description: Missing session
      403:
        description: Invalid or expired session
    """
    data = [s.to_dict() for s in list_submissions()]
    return _ok('All submissions retrieved successfully.', data)


@submissions_bp.route('/verify/<int:submission_id>', methods=['POST'])
@jwt_required()
def verify(submission_id):
    """
    Mark a submission's payment as verified
    ---
    tags:
      - Submissions
    parameters:
      - name: submission_id
        in: path
        type: integer
        required: true
    security:
      - Bearer: []
    responses:
      200:
        description: Updated submission
      404:
        description: Submission not found
      409:
        description: Transition not allowed (strict mode only)
    """
    submission = verify_submission(submission_id)
    return _ok('Submission marked as verified.', submission.to_dict())


@submissions_bp.route('/checkin/<int:submission_id>', methods=['POST'])
@jwt_required()
def checkin(submission_id):
    """
    Check an attendee in
    ---
    tags:
      - Submissions
    parameters:
      - name: submission_id
        in: path
        type: integer
        required: true
    security:
      - Bearer: []
    responses:
      200:
        description: Updated submission
      404:
        description: Submission not found
      409:
        description: Transition not allowed (strict mode only)
    """
    submission = check_in_submission(submission_id)
    return _ok(f'{submission.name} checked in successfully.', submission.to_dict())


@submissions_bp.route('/uncheckin/<int:submission_id>', methods=['POST'])
@jwt_required()
def uncheckin(submission_id):
    """
    Undo a check-in (back to verified)
    ---
    tags:
      - Submissions
    parameters:
      - name: submission_id
        in: path
        type: integer
        required: true
    security:
      - Bearer: []
    responses:
      200:
        description: Updated submission
      404:
        description: Submission not found
      409:
        description: Transition not allowed (strict mode only)
    """
    submission = uncheck_submission(submission_id)
    return _ok(f'{submission.name} unchecked in successfully.', submission.to_dict())


@submissions_bp.route('/submissions/<int:submission_id>', methods=['DELETE'])
@jwt_required()
def delete(submission_id):
    """
    Delete a submission and its stored screenshot
    ---
    tags:
      - Submissions
    parameters:
      - name: submission_id
        in: path
        type: integer
        required: true
    security:
      - Bearer: []
    responses:
      200:
        description: The deleted submission
      404:
        description: Submission not found
    """
    data = delete_submission(submission_id)
    return _ok('Submission deleted successfully.', data)
