# ============================================================================
# FILE: moodtune/db/session.py
# ============================================================================
from typing import Generator
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for the configured database"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests and pipeline steps hand the session between threads
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, echo=echo, future=True)

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session bound to the running application's engine"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
