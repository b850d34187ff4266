from app.models.user import User
from app.models.destination import Destination
from app.models.trip import Trip, trip_guides
from app.models.guide import Guide
from app.models.trip_registration import TripRegistration
from app.models.log import Log

# This makes the models directory a Python package and ensures all models are loaded
