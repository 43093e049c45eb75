"""Pipeline activities.

Each activity is a single step of the per-share pipeline:
fetch_feed -> parse_feed -> map_messages, then submit_features once per run.
"""
