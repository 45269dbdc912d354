"""
                        Services Module

Business logic behind the HTTP surface. Every service works against the
repository interfaces in tiffin.store and takes the caller's Session as an
explicit argument where access depends on identity.

Services:
    - auth: password/OTP authentication and session tokens
    - authorization: role gate
    - catalog: dish listing
    - orders: order lifecycle (the core)
    - delivery: delivery-partner projections
    - payment: mock payment gateway and order payment updates
    - notifications: SMS delivery and in-app notification inbox
    - admin: aggregate statistics and account management
"""
