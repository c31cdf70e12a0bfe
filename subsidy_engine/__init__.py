"""
Employment Subsidy Eligibility Engine

Determines which employment-subsidy programs an employer qualifies for and
the maximum amount each would pay, from a company profile and employee roster.
"""

__version__ = "1.0.0"
__author__ = "Subsidy Engine Team"
__description__ = "Eligibility and amount calculation engine for employment subsidies"
