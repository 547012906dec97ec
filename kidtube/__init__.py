"""
KidTube backend.

FastAPI service that turns a child's age, gender and interests into a
playlist of kid-friendly video recommendations.
"""
