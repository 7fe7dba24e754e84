import asyncio
import logging
from insurance_contract.db.session import engine
from insurance_contract.db.base import Base
# Import all models to register with Base
import insurance_contract.models  # noqa: F401

logger = logging.getLogger(__name__)

async def init_models(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_models())
