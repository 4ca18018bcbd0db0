"""
NexusAI Placement Platform
Job-placement backend connecting students, colleges and recruiters.

Architecture:
- MongoDB: Primary document store (jobs, users with embedded applications)
- SQLite: Local relational fallback when MongoDB is unreachable at startup
- Socket.IO: Real-time job events pushed to every connected client
"""

__version__ = "1.0.0"
