from loguru import logger
from sinceonearth.core.db import engine, Base

# Import all models so SQLAlchemy registers them
from sinceonearth.models.user import User
from sinceonearth.models.invite_code import InviteCode
from sinceonearth.models.flight import Flight
from sinceonearth.models.stayin import StayIn
from sinceonearth.models.airport import Airport

from sinceonearth.modules.contact.models import ContactMessage

def init_db():
    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
