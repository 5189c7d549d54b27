# common/deps.py
from fastapi import HTTPException, Request


# ---------------------------
# Form session
# ---------------------------
def get_form_session(request: Request):
    """
    The app owns exactly one FormSession (created at startup and kept on
    app.state); routes receive it through this dependency.
    """
    session = getattr(request.app.state, "form_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Form session not initialized")
    return session
