"""
Content-based recommendation engine.

Responsibilities:
- Score every catalog product against one user's preference state.
- Drop products the user already liked or disliked.
- Rank by score, keeping catalog order on ties, and cap the result size.
"""
