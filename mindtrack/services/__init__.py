"""MindTrack services.

- mood_service: mood entries, insights, wellness goals, safety plans
- therapy_service: sessions, conversations, assessments, progress,
  crisis interventions, therapeutic resources
- research_service: anonymous aggregate statistics
- risk_engine: deterministic intervention-level scoring
- wellness_api: Flask adapter exposing every operation over HTTP

All per-user reads go through the shared OwnershipGuard; all principals
are logged via hash_pii().
"""
