"""Demo application for oauthstore."""
