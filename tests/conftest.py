import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shedula.database import Base, build_engine, get_db
from shedula.main import app
from shedula.seed import seed_demo_data


@pytest.fixture
def shedula_db():
    engine = build_engine('sqlite://')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = testing_session_local()
    seed_demo_data(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(shedula_db):
    app.dependency_overrides[get_db] = lambda: shedula_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
