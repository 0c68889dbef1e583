import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shedula.core import config
from shedula.database import Base, SessionLocal, engine
from shedula.models import appointment, doctor, doctor_appointment, doctor_user, patient, user  # noqa: F401
from shedula.routes import (
    appointment_routes,
    auth_routes,
    doctor_portal_routes,
    doctor_routes,
    stats_routes,
    user_routes,
)
from shedula.seed import seed_demo_data

app = FastAPI(title='Shedula API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        if config.SEED_DEMO_DATA:
            db = SessionLocal()
            try:
                seed_demo_data(db)
            finally:
                db.close()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == 'Not Found':
        message = 'Route not found'
    return JSONResponse(
        status_code=exc.status_code,
        content={'message': message},
        headers=getattr(exc, 'headers', None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]['msg'].removeprefix('Value error, ') if errors else 'Invalid request'
    logger.warning('Rejected request body on %s %s: %s', request.method, request.url.path, errors)
    return JSONResponse(
        status_code=422,
        content={'message': message, 'errors': jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': 'Something went wrong!'},
    )


@app.get('/')
def root():
    return {'status': 'Shedula API Running'}


@app.get('/api/health')
def health():
    return {'status': 'OK', 'message': 'Shedula API is running'}


app.include_router(auth_routes.router, prefix='/api/auth')
app.include_router(doctor_routes.router, prefix='/api/doctors')
app.include_router(appointment_routes.router, prefix='/api/appointments')
app.include_router(user_routes.router, prefix='/api/users')
app.include_router(stats_routes.router, prefix='/api/stats')
app.include_router(doctor_portal_routes.router, prefix='/api/doctor')
