# Supabase Auth
# Users live in Supabase's auth.users table; no custom tables are required.
# A database trigger (managed in Supabase) creates the matching row in
# public.profiles on signup, seeding full_name from the signup metadata.

"""
Supabase Auth calls used by this module:
- auth.sign_up() - register with email/password and user_metadata.full_name
- auth.sign_in_with_password() - returns the session (access/refresh token)
- auth.get_user(jwt) - resolve the bearer token of each request
- auth.admin.sign_out(jwt) - revoke the session server-side

The access token is then forwarded to PostgREST and Storage so that
row-level security policies see auth.uid() = the signed-in user.
"""
