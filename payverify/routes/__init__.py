from payverify.routes.admin import admin_bp
from payverify.routes.submissions import submissions_bp

__all__ = ["admin_bp", "submissions_bp"]
