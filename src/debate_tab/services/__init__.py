"""Draw generation, judge allocation and their file/report helpers."""
