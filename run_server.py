import uvicorn
import os

if __name__ == "__main__":
    log_dir = os.environ.setdefault("SEMLOG_LOG_DIR", os.path.join(os.getcwd(), "var", "semantic-logs"))

    print("Starting Semantic Log Viewer...")
    print(f"Serving documents from: {log_dir}")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "semlog.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
