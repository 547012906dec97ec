"""
Quick demo script to run the KidTube API locally.

This script starts a local server and shows how to make requests to the endpoint.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting KidTube Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Recommendations:  POST http://localhost:8000/api/recommendations")
    print("   - Interests:        GET  http://localhost:8000/interests?age=6&sex=female")
    print("   - Password gate:    POST http://localhost:8000/auth/gate")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("🔑 Optional API keys (.env):")
    print("   GOOGLE_API_KEY   - Gemini search-term synthesis")
    print("   YOUTUBE_API_KEY  - real YouTube results")
    print("   Without them the API answers with targeted search links.")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"age": 6, "sex": "female", "interests": ["animals", "music"]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "kidtube.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
