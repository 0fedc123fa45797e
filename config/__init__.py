"""Runtime configuration for the Sora Clean Creator Desk."""
