import secrets


def int_sample(bound):
    """
    Uniform integer in [1, bound) from the OS CSPRNG.
    Zero is excluded so sampled coefficients and nonces are never trivial.
    """
    if bound < 2:
        raise ValueError(f"Sampling bound too small: {bound}")
    return 1 + secrets.randbelow(bound - 1)


def field_sample(order):
    """Uniform element of the scalar field [0, order)."""
    return secrets.randbelow(order)
