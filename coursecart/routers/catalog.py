from fastapi import APIRouter, Query

from coursecart.schemas.catalog import CatalogCourse
from coursecart.services.catalog import search_courses

router = APIRouter(prefix="/courses", tags=["Courses"])


# upstream failures come back as an empty list ("no courses found")
@router.get("/search", response_model=list[CatalogCourse])
def search(q: str = Query("", description="Subject code or keyword, e.g. CSCI-UA")):
    return search_courses(q)
