"""Run controller.

Fans out one task per share, joins them, merges the results, and
submits the collection.
"""
