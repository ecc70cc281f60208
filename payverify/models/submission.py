"""
Submission Model — one attendee's payment proof.
Status: pending | verified | checked_in
"""

from payverify.extensions import db


class SubmissionStatus:
    PENDING = "pending"
    VERIFIED = "verified"
    CHECKED_IN = "checked_in"

    ALL = (PENDING, VERIFIED, CHECKED_IN)


class Submission(db.Model):
    __tablename__ = "submissions"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    # Normalized value; uniqueness is enforced here, not in application code
    phone = db.Column(db.String(25), nullable=False, unique=True)
    screenshot = db.Column(db.String(255), nullable=False)
    screenshot_public_id = db.Column(db.String(255), nullable=False)
    status = db.Column(
        db.Enum(*SubmissionStatus.ALL, name="submission_status", native_enum=False),
        nullable=False,
        default=SubmissionStatus.PENDING,
        server_default=SubmissionStatus.PENDING,
    )
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    @property
    def verified(self):
        # Deprecated boolean view kept for clients of the old schema
        return self.status != SubmissionStatus.PENDING

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "screenshot": self.screenshot,
            "screenshot_public_id": self.screenshot_public_id,
            "status": self.status,
            "verified": self.verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
