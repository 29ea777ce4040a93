"""FastAPI dependency injection."""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from wisebond.config import settings
from wisebond.data.prime_rate import PrimeRateClient

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_prime_rate_client() -> PrimeRateClient:
    return PrimeRateClient()
