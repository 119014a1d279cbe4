from supabase import create_client, Client
from typing import Optional

from config.settings import settings

class SupabaseClient:
    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._instance is None:
            supabase_url = settings.SUPABASE_URL
            supabase_key = settings.SUPABASE_KEY

            if not supabase_url or not supabase_key:
                raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set in environment variables")

            cls._instance = create_client(supabase_url, supabase_key)

        return cls._instance

# Convenience function to get the client
def get_supabase() -> Client:
    return SupabaseClient.get_client()
