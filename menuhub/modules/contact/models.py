# Supabase tables in the directory project: contact_submissions, company_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

contact_submissions:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null)
- phone: text (nullable)
- restaurant_name: text (not null)
- budget: text (not null)
- number_of_tables: text (not null)
- current_menu_type: text (not null)
- features: text[] (default: '{}')
- additional_info: text (nullable)
- created_at: timestamp (default: now())

company_settings (single row):
- contact_email: text (nullable) - where new submissions are announced
"""
