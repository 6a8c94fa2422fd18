# portal/core/supabase_client.py
from supabase import create_client, Client

from portal.core.config import get_settings

settings = get_settings()


def supabase_public() -> Client:
    """
    Create a Supabase client with the anon/public key.

    Use cases:
      - sign-in / sign-up / password reset (no session yet)

    Note: This client still respects RLS. A fresh client is returned on
    every call because the auth client keeps session state in memory.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def supabase_for_token(access_token: str) -> Client:
    """
    Create a Supabase client acting as the signed-in user.

    PostgREST requests carry the user's access token, so row-level
    security behaves exactly as it does for the static pages.
    """
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    client.postgrest.auth(access_token)
    return client
