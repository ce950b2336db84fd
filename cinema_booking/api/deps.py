from fastapi import Header


async def get_current_user_id(user_id: int = Header(..., alias="X-User-Id", gt=0)) -> int:
    """
    Id of the user making the request.

    Token verification happens in front of this service; by the time a request
    reaches a route the gateway has put the authenticated user id in X-User-Id.
    """
    return user_id
