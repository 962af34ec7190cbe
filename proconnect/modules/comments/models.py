# Supabase table: comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- post_id: uuid (foreign key to posts.id, not null, on delete cascade)
- user_id: uuid (foreign key to profiles.id, not null, on delete cascade)
- content: text (not null)
- created_at: timestamp (default: now())

RLS: select for authenticated users; insert only where user_id = auth.uid().
Threads are read oldest first (created_at ascending).
"""
