import logging
from contenthub.config.database import SessionLocal, Base, engine
from contenthub.seed import run_seed

# Ensure tables exist
Base.metadata.create_all(bind=engine)

def seed():
    db = SessionLocal()
    try:
        run_seed(db)
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
