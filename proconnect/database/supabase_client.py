from supabase import create_client, Client
from proconnect.config import settings
import logging

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anon client, used for auth calls that carry no user session."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def for_user(cls, access_token: str) -> Client:
        """Client acting as the signed-in user so row-level security applies.

        PostgREST and Storage clients are built lazily from ``options.headers``,
        so the bearer token must be in place before the first table or storage call.
        """
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.options.headers["Authorization"] = f"Bearer {access_token}"
        return client

    @classmethod
    def close(cls, client: Client) -> None:
        """Close the HTTP sessions a per-user client opened (lazy ones may not exist)."""
        postgrest = getattr(client, "_postgrest", None)
        storage = getattr(client, "_storage", None)
        auth = getattr(client, "auth", None)
        sessions = [
            getattr(postgrest, "session", None),
            getattr(storage, "_client", None),
            getattr(auth, "_http_client", None),
        ]
        for session in sessions:
            if session is None:
                continue
            try:
                session.close()
            except Exception as e:
                logger.warning(f"Failed to close Supabase session: {e}")

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
