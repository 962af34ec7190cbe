# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id on delete cascade)
- full_name: text (not null) - seeded from signup metadata by a trigger
- headline: text (nullable)
- bio: text (nullable)
- avatar_url: text (nullable) - public URL in the "avatars" bucket
- created_at: timestamp (default: now())

RLS: select for authenticated users; update only where id = auth.uid().

Storage bucket "avatars" (public): one object per user at {user_id}/avatar.{ext},
overwritten (upsert) on every avatar change.
"""
