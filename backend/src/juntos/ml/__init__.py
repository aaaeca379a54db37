"""
ML package for Juntos opportunity matching.

- content_analysis/ - Opportunity categorization from free text
- recommendations/ - Recommendation strategies and the engine that blends them
- shared/ - Common utilities (geographic distance)
"""
