"""Commands registered on the contentstash app."""
