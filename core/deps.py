from fastapi import HTTPException, Request, status


def require_json(request: Request) -> None:
    """Reject request bodies that are not declared as JSON."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Content type '{content_type or 'none'}' not supported",
        )
