# Supabase tables in the directory project: restaurants, activity_logs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

restaurants:
- id: uuid (primary key)
- name: text (not null)
- supabase_url: text (not null) - the restaurant's own project URL
- supabase_anon_key: text (not null) - the restaurant's own anon key
- connection_status: text (nullable) - values: connected, pending, error
- last_connected_at: timestamp (nullable) - set by keep-alive pings

activity_logs:
- id: uuid (primary key)
- restaurant_id: uuid (foreign key to restaurants.id)
- action: text (not null) - e.g. keep_alive_ping
- details: jsonb (nullable)
- created_at: timestamp (default: now())
"""
