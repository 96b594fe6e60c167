import logging

import uvicorn
from fastapi import FastAPI

from examcheck.config import API_TITLE, API_VERSION, HOST, PORT, DEBUG, DATA_DIR
from examcheck.routes import check_routes, scan_routes, student_routes, test_routes

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("examcheck")

app = FastAPI(title=API_TITLE, version=API_VERSION)

app.include_router(student_routes.router)
app.include_router(test_routes.router)
app.include_router(check_routes.router)
app.include_router(scan_routes.router)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.on_event("startup")
async def startup_event():
    """Startup event"""
    logger.info(f"Starting {API_TITLE} on http://{HOST}:{PORT}")
    logger.info(f"Debug mode: {DEBUG}")
    logger.info(f"Data directory: {DATA_DIR}")

if __name__ == "__main__":
    uvicorn.run("examcheck.main:app", host=HOST, port=PORT, reload=DEBUG)
