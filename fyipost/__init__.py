"""
FYI Post Wizard

A turn-based questionnaire that collects a post recommendation
(source type, URL, description, priority) and stores it per user.
"""

__version__ = "1.0.0"
