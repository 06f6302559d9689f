from braidr.main import app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("braidr.main:app", host="0.0.0.0", port=8000, reload=True)
