"""Campus notification and content service.

Fans authored notifications out to students, tracks their read state, serves the
live events and opportunities feed and sweeps expired content away.
"""
