# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, les FK vers users.id échouent avec NoReferencedTableError
# si user.py n'est pas chargé avant les autres modèles.

from passport.models.user import User  # noqa: F401  — doit précéder les autres
from passport.models.mentorship import MentorStudentAssignment  # noqa: F401
from passport.models.activity import Activity  # noqa: F401
from passport.models.qualification import Qualification  # noqa: F401
from passport.models.teaching_session import TeachingSession  # noqa: F401
from passport.models.cv import StudentCV  # noqa: F401
from passport.models.message import Message  # noqa: F401
