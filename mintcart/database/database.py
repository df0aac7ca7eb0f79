from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import os

_database = os.getenv('POSTGRES_DB')
_user = os.getenv('POSTGRES_USER')
_password = os.getenv('POSTGRES_PASSWORD')
_host = os.getenv('POSTGRES_HOST')
_port = os.getenv('POSTGRES_PORT')

DATABASE_URL = os.getenv('DATABASE_URL') or f'postgresql://{_user}:{_password}@{_host}:{_port}/{_database}'

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
sessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = sessionLocal()
    try:
        yield db
    finally:
        db.close()
