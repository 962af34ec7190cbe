# Supabase table: posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to profiles.id, not null, on delete cascade)
- content: text (not null, may be empty when the post carries an image)
- image_url: text (nullable) - public URL in the "post-images" bucket
- created_at: timestamp (default: now())

RLS: select for authenticated users; insert/update/delete only where user_id = auth.uid().
likes and comments reference posts.id with on delete cascade.

Storage bucket "post-images" (public): objects at {user_id}/{epoch_millis}.{ext}
"""
