# Supabase table: likes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- post_id: uuid (foreign key to posts.id, not null, on delete cascade)
- user_id: uuid (foreign key to profiles.id, not null, on delete cascade)
- created_at: timestamp (default: now())
- unique (post_id, user_id)

RLS: select for authenticated users; insert/delete only where user_id = auth.uid().
"""
