import os
import uvicorn
from storefront.main import app

# Point d'entrée local : uvicorn main:app
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")), reload=True)
