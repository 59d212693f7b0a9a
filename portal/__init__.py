"""
University Placement Portal
Jobs, forums, presentations, calendar and placement statistics
for students and the placement cell.

Architecture:
- PostgreSQL via SQLAlchemy ORM: all structured data
- Local disk: uploaded PDFs (resumes, company presentations)
"""

__version__ = "1.0.0"
