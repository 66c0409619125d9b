"""
Course assignments: admin links lecturers to courses, one row per pair.
"""

from eduai.models.course_assignment import CourseAssignment


class TestAssignments:
    def test_admin_assigns_course(self, client, admin, lecturer, course):
        admin_profile, headers = admin
        lecturer_profile, _ = lecturer

        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": course["id"], "lecturer_id": lecturer_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["assigned_by"] == admin_profile["id"]
        assert body["course"]["code"] == course["code"]
        assert body["lecturer"]["email"] == lecturer_profile["email"]

    def test_duplicate_pair_is_rejected(self, client, admin, lecturer, assigned_course, db_session):
        _, headers = admin
        lecturer_profile, _ = lecturer

        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": assigned_course["id"], "lecturer_id": lecturer_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 409
        assert db_session.query(CourseAssignment).count() == 1

    def test_same_course_can_go_to_two_lecturers(self, client, admin, lecturer, other_lecturer, assigned_course):
        _, headers = admin
        other_profile, _ = other_lecturer
        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": assigned_course["id"], "lecturer_id": other_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 201

    def test_unknown_course_or_lecturer(self, client, admin, lecturer, course):
        admin_profile, headers = admin
        lecturer_profile, _ = lecturer

        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": 9999, "lecturer_id": lecturer_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 404

        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": course["id"], "lecturer_id": 9999},
            headers=headers,
        )
        assert response.status_code == 404

    def test_cannot_assign_to_admin(self, client, admin, course):
        admin_profile, headers = admin
        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": course["id"], "lecturer_id": admin_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 400

    def test_lecturer_cannot_assign(self, client, lecturer, course):
        lecturer_profile, headers = lecturer
        response = client.post(
            "/api/v1/assignments/",
            json={"course_id": course["id"], "lecturer_id": lecturer_profile["id"]},
            headers=headers,
        )
        assert response.status_code == 403

    def test_lecturer_sees_only_own_assignments(
        self, client, admin, lecturer, other_lecturer, assigned_course
    ):
        _, admin_headers = admin
        lecturer_profile, lecturer_headers = lecturer
        _, other_headers = other_lecturer

        mine = client.get("/api/v1/assignments/", headers=lecturer_headers).json()
        assert len(mine) == 1
        assert mine[0]["lecturer_id"] == lecturer_profile["id"]
        assert mine[0]["course"]["id"] == assigned_course["id"]
        assert mine[0]["lecturer"] is None

        assert client.get("/api/v1/assignments/", headers=other_headers).json() == []

        everything = client.get("/api/v1/assignments/", headers=admin_headers).json()
        assert len(everything) == 1
        assert everything[0]["lecturer"]["id"] == lecturer_profile["id"]

    def test_unassign(self, client, admin, lecturer, assigned_course):
        _, headers = admin
        _, lecturer_headers = lecturer
        assignment_id = client.get("/api/v1/assignments/", headers=headers).json()[0]["id"]

        response = client.delete(f"/api/v1/assignments/{assignment_id}", headers=headers)
        assert response.status_code == 204
        assert client.get("/api/v1/assignments/", headers=lecturer_headers).json() == []

    def test_lecturer_listing_is_paged(self, client, admin, lecturer, assigned_course):
        _, admin_headers = admin
        lecturer_profile, lecturer_headers = lecturer
        second = client.post(
            "/api/v1/courses/",
            json={"title": "Compilers", "code": "CS440"},
            headers=admin_headers,
        ).json()
        client.post(
            "/api/v1/assignments/",
            json={"course_id": second["id"], "lecturer_id": lecturer_profile["id"]},
            headers=admin_headers,
        )

        first_page = client.get(
            "/api/v1/assignments/", params={"limit": 1}, headers=lecturer_headers
        ).json()
        second_page = client.get(
            "/api/v1/assignments/", params={"skip": 1, "limit": 1}, headers=lecturer_headers
        ).json()

        assert len(first_page) == 1 and len(second_page) == 1
        assert {first_page[0]["course_id"], second_page[0]["course_id"]} == {
            assigned_course["id"],
            second["id"],
        }
