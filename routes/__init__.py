from .health import health_bp
from .booking import booking_bp
from .courts import court_bp
from .users import user_bp
