from payverify.models.submission import Submission, SubmissionStatus

__all__ = ["Submission", "SubmissionStatus"]
