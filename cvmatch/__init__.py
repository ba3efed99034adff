"""
cvmatch - CV extraction and candidate/job match scoring for a recruitment CRM.

Turns uploaded résumé files into structured candidate records and scores
candidates against job requisitions.
"""

__app_name__ = "cvmatch"
__version__ = "0.1.0"
