"""
Core presigning logic.

This package doesn't import FastAPI or boto3; the presign client is handed
in by the caller, so the rules can be tested in isolation.
"""
