"""Routing — path templates compiled to regexes when the app freezes."""
