from functools import lru_cache
from supabase import Client, create_client
from .config import get_settings
from .utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    """
    Returns a singleton Supabase client configured with service role credentials.
    Used for every catalog read and review write.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_supabase_anon_client() -> Client:
    """
    Client for the password login/signup routes. Without an anon key the
    service role key is used, which signs users in but skips row level security.
    """
    settings = get_settings()
    if not settings.SUPABASE_ANON_KEY:
        logger.warning("SUPABASE_ANON_KEY is not set; auth routes fall back to the service role key")
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
