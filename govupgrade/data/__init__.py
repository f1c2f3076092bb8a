"""
Governance record models and input adaptation.

Turns raw governance query records into immutable proposal models and
validates the decimal-integer strings they carry.
"""
