#!/usr/bin/env python3
"""Run script for the weekplan state server."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "weekplan.api.app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5173")),
        reload=True
    )
