# eduai/models/__init__.py
from eduai.models.identity import Identity, AuthSession  # noqa
from eduai.models.profile import Profile  # noqa
from eduai.models.course import Course  # noqa
from eduai.models.course_assignment import CourseAssignment  # noqa
from eduai.models.generated_content import GeneratedContent  # noqa
