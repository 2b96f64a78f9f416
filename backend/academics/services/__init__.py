from .profiles import get_or_provision_student_profile, provision_student_profile  # noqa: F401
