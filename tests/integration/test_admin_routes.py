"""
API integration tests for the student, dashboard and course management routes.
"""
import cloudinary.uploader
import pytest

from app.core.config import settings

ADMIN = (settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


@pytest.mark.integration
@pytest.mark.asyncio
class TestAdminGate:
    @pytest.mark.parametrize("method, path", [
        ("GET", "/api/v1/dashboard"),
        ("GET", "/api/v1/students"),
        ("DELETE", "/api/v1/students/stu-1"),
        ("GET", "/api/v1/courses"),
        ("DELETE", "/api/v1/courses/course-1"),
    ])
    async def test_requires_admin(self, api_client, method, path):
        response = await api_client.request(method, path)
        assert response.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
class TestStudentRoutes:
    async def test_dashboard(self, api_client):
        response = await api_client.get("/api/v1/dashboard", auth=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"student_count": 1, "course_count": 2}

    async def test_create_list_delete_restore(self, api_client):
        created = await api_client.post(
            "/api/v1/students",
            json={"name": "Grace", "surname": "Hopper", "email": "grace@navy.mil"},
            auth=ADMIN,
        )
        assert created.status_code == 201
        student = created.json()
        assert student["status"] == "Active"
        assert student["skill_level"] == "Beginner"

        listed = await api_client.get("/api/v1/students", auth=ADMIN)
        assert {s["id"] for s in listed.json()} == {"stu-1", student["id"]}

        deleted = await api_client.delete(f"/api/v1/students/{student['id']}", auth=ADMIN)
        assert deleted.json()["status"] == "Deleted"
        listed = await api_client.get("/api/v1/students", auth=ADMIN)
        assert [s["id"] for s in listed.json()] == ["stu-1"]
        found = await api_client.get("/api/v1/students", params={"search": "hopper"}, auth=ADMIN)
        assert [s["id"] for s in found.json()] == [student["id"]]

        restored = await api_client.post(f"/api/v1/students/{student['id']}/restore", auth=ADMIN)
        assert restored.status_code == 200
        assert restored.json()["status"] == "Active"

    async def test_deleted_student_report_shows_status(self, api_client):
        await api_client.delete("/api/v1/students/stu-1", auth=ADMIN)

        report = await api_client.get("/api/v1/students/stu-1/progress", auth=ADMIN)

        assert report.status_code == 200
        assert report.json()["account_status"] == "Deleted"

    async def test_invalid_email_rejected(self, api_client):
        response = await api_client.post(
            "/api/v1/students",
            json={"name": "A", "surname": "B", "email": "not-an-email"},
            auth=ADMIN,
        )
        assert response.status_code == 422

    async def test_restore_unknown_student(self, api_client):
        response = await api_client.post("/api/v1/students/nobody/restore", auth=ADMIN)
        assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
class TestCourseRoutes:
    async def test_course_lifecycle(self, api_client):
        created = await api_client.post(
            "/api/v1/courses",
            json={"title": "Statistics", "category": "Mathematics"},
            auth=ADMIN,
        )
        assert created.status_code == 201
        course_id = created.json()["id"]

        patched = await api_client.patch(
            f"/api/v1/courses/{course_id}", json={"difficulty": "Advanced"}, auth=ADMIN
        )
        assert patched.json()["title"] == "Statistics"
        assert patched.json()["difficulty"] == "Advanced"

        listed = await api_client.get("/api/v1/courses", auth=ADMIN)
        by_id = {c["id"]: c for c in listed.json()}
        assert by_id[course_id]["enrollment_count"] == 0
        assert by_id["course-1"]["enrollment_count"] == 1

        deleted = await api_client.delete(f"/api/v1/courses/{course_id}", auth=ADMIN)
        assert deleted.status_code == 204
        missing = await api_client.get(f"/api/v1/courses/{course_id}", auth=ADMIN)
        assert missing.status_code == 404

    async def test_course_detail(self, api_client):
        response = await api_client.get("/api/v1/courses/course-1", auth=ADMIN)

        assert response.status_code == 200
        assert [l["id"] for l in response.json()["lessons"]] == ["l-intro", "l-loops", "l-funcs"]

    async def test_delete_course_removes_stored_image(self, api_client, monkeypatch):
        destroyed = []
        monkeypatch.setattr(
            cloudinary.uploader, "upload",
            lambda file, **options: {
                "secure_url": "https://res.cloudinary.com/demo/image/upload/v3/courses/cover.png",
                "public_id": "courses/cover",
            },
        )
        monkeypatch.setattr(
            cloudinary.uploader, "destroy",
            lambda public_id, **options: destroyed.append(public_id) or {"result": "ok"},
        )
        await api_client.put(
            "/api/v1/courses/course-1/image",
            files={"image": ("cover.png", b"png", "image/png")},
            auth=ADMIN,
        )

        response = await api_client.delete("/api/v1/courses/course-1", auth=ADMIN)

        assert response.status_code == 204
        assert destroyed == ["courses/cover"]
        report = await api_client.get("/api/v1/students/stu-1/courses/course-1/progress", auth=ADMIN)
        assert report.json()["course_name"] == "course-1"
        assert report.json()["total_lessons"] == 0

    async def test_lesson_and_quiz_lifecycle(self, api_client):
        lesson = await api_client.post(
            "/api/v1/courses/course-2/lessons",
            json={"title": "Welcome", "content_type": "Link", "content_urls": ["https://example.com/w"]},
            auth=ADMIN,
        )
        assert lesson.status_code == 201
        lesson_id = lesson.json()["id"]
        base = f"/api/v1/courses/course-2/lessons/{lesson_id}"

        quiz = await api_client.post(
            f"{base}/quizzes",
            json={"question": "2 + 2?", "option_a": "3", "option_b": "4",
                  "option_c": "5", "option_d": "22", "correct_answer": "B"},
            auth=ADMIN,
        )
        assert quiz.status_code == 201
        quiz_id = quiz.json()["id"]

        detail = await api_client.get(base, auth=ADMIN)
        assert [q["id"] for q in detail.json()["quizzes"]] == [quiz_id]

        patched = await api_client.patch(f"{base}/quizzes/{quiz_id}", json={"option_d": "four"}, auth=ADMIN)
        assert patched.json()["option_d"] == "four"
        assert patched.json()["correct_answer"] == "B"

        assert (await api_client.delete(f"{base}/quizzes/{quiz_id}", auth=ADMIN)).status_code == 204
        assert (await api_client.delete(base, auth=ADMIN)).status_code == 204

        lessons = await api_client.get("/api/v1/courses/course-2/lessons", auth=ADMIN)
        assert lessons.json() == []

    async def test_quiz_answer_key_validated(self, api_client):
        response = await api_client.post(
            "/api/v1/courses/course-1/lessons/l-intro/quizzes",
            json={"question": "Q", "option_a": "a", "option_b": "b",
                  "option_c": "c", "option_d": "d", "correct_answer": "E"},
            auth=ADMIN,
        )
        assert response.status_code == 422

    async def test_patch_lesson_in_wrong_course(self, api_client):
        response = await api_client.patch(
            "/api/v1/courses/course-2/lessons/l-intro", json={"title": "Moved"}, auth=ADMIN
        )
        assert response.status_code == 404
