"""Operation handlers, one service class per aggregate."""
