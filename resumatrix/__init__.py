"""
ResuMatrix API - LaTeX resume compilation, AI tailoring and ATS scoring.
"""
__version__ = "1.0.0"
