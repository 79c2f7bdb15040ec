# backend/petconnect/db/models/__init__.py

from petconnect.db.models.profile import Profile
from petconnect.db.models.pet import Pet
from petconnect.db.models.found_report import FoundReport
