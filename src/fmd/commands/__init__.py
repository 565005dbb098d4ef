"""Click plumbing shared by the fmd command."""
