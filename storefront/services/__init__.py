"""Services: Supabase-backed repositories, domain services and money helpers."""
