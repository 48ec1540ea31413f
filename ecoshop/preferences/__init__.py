"""
Per-user like/dislike preference state.

Liked and disliked products are held by one immutable value object so a
product can never sit in both sets; preferred categories are derived from
it on demand.
"""
