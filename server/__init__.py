"""HTTP host for Crazy Eights sessions."""
