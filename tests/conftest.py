"""Pytest configuration and shared fixtures."""

import os


# Settings are read at import time; keep tests independent of a developer's .env and AWS profile.
os.environ.setdefault("DYNAMODB_TABLE_NAME", "TodoTasks")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TASK_STORE_BACKEND", "dynamodb")
os.environ.setdefault("API_PREFIX", "/api")
