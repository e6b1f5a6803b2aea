from .db import db
from .audit_log import AuditLog
from .court import Court
from .user import User
from .slot import Slot
from .booking import Booking
from .billing import Billing
from .deleted_user import DeletedUser
