from fastapi import APIRouter

from sinceonearth.api.routes import admin
from sinceonearth.api.routes import auth
from sinceonearth.api.routes import flights
from sinceonearth.api.routes import radar
from sinceonearth.api.routes import stats
from sinceonearth.api.routes import stayins
from sinceonearth.modules.contact import routes as contact

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(admin.router)
api_router.include_router(contact.admin_router)
api_router.include_router(contact.router)
api_router.include_router(flights.router)
api_router.include_router(stayins.router)
api_router.include_router(stats.router)
api_router.include_router(radar.router)
