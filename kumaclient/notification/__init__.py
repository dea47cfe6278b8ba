"""Notification models: shared base, generic settings and ntfy, Slack, Teams and webhook providers."""