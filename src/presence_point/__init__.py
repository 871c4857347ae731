"""PresencePoint attendance dashboard.

This package is organized by feature modules (students, lessons, attendance,
scanning, ...) with a thin Flask controller layer on top of service/repository
layers. Storage and authentication live in a hosted Supabase project.
"""
