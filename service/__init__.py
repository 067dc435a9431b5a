"""Account, session and file catalog services around the chunk store core."""
