from .cpsat import solve_cpsat

__all__ = ["solve_cpsat"]
