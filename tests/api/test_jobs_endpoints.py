"""Tests for job posting endpoints: listing, detail and owner-only mutations."""


class TestCreateJob:
    def test_company_creates_job(self, api):
        token = api.register_company()
        response = api.create_job(token)

        assert response.status_code == 201
        job = response.json()
        assert job["title"] == "Engineer"
        assert job["company"]["name"] == "Acme"
        assert job["applicationCount"] == 0
        assert "createdAt" in job

    def test_anonymous_rejected(self, api):
        assert api.create_job(None).status_code == 401

    def test_applicant_rejected(self, api):
        token = api.register_applicant()
        assert api.create_job(token).status_code == 403

    def test_missing_required_field(self, api):
        token = api.register_company()
        response = api.create_job(token, title="")
        assert response.status_code == 400

    def test_company_without_profile(self, api):
        token = api.register("Solo", "solo@co.com", role="COMPANY").json()["token"]
        response = api.create_job(token)

        assert response.status_code == 400
        assert "company profile" in response.json()["detail"]


class TestReadJobs:
    def test_get_job(self, api):
        token = api.register_company()
        job_id = api.create_job_id(token)

        response = api.get(f"/jobs/{job_id}")
        assert response.status_code == 200
        assert response.json()["company"]["description"] == "Acme builds things"

    def test_get_missing_job(self, api):
        response = api.get("/jobs/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"

    def test_list_with_filters_and_pagination(self, api):
        token = api.register_company()
        for i in range(12):
            api.create_job_id(token, title=f"Engineer {i}", category="Technology")
        api.create_job_id(token, title="Accountant", category="Finance", location="Paris")

        response = api.get("/jobs", params={"category": "technology", "limit": 5, "page": 3})
        data = response.json()

        assert response.status_code == 200
        assert data["pagination"] == {"page": 3, "limit": 5, "total": 12, "pages": 3}
        assert len(data["jobs"]) == 2
        assert all(job["category"] == "Technology" for job in data["jobs"])

    def test_list_newest_first(self, api):
        token = api.register_company()
        api.create_job_id(token, title="First")
        api.create_job_id(token, title="Second")

        titles = [job["title"] for job in api.get("/jobs").json()["jobs"]]
        assert titles == ["Second", "First"]

    def test_list_defaults(self, api):
        data = api.get("/jobs").json()
        assert data == {"jobs": [], "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0}}

    def test_invalid_pagination(self, api):
        assert api.get("/jobs", params={"page": 0}).status_code == 400
        assert api.get("/jobs", params={"limit": 0}).status_code == 400
        assert api.get("/jobs", params={"limit": 1000}).status_code == 400
        assert api.get("/jobs", params={"page": 10**18}).status_code == 400

    def test_last_allowed_page_is_empty(self, api):
        response = api.get("/jobs", params={"page": 1_000_000, "limit": 100})

        assert response.status_code == 200
        assert response.json()["jobs"] == []


class TestMutateJobs:
    def test_owner_updates_subset_of_fields(self, api):
        token = api.register_company()
        job_id = api.create_job_id(token)

        response = api.client.put(
            f"/api/v1/jobs/{job_id}",
            json={"salary": "80k", "location": "Munich"},
            headers=api.headers(token),
        )
        assert response.status_code == 200
        job = response.json()
        assert job["salary"] == "80k"
        assert job["location"] == "Munich"
        assert job["title"] == "Engineer"

    def test_other_company_cannot_update(self, api):
        acme = api.register_company("Acme", "hr@acme.com")
        globex = api.register_company("Globex", "hr@globex.com")
        job_id = api.create_job_id(acme)

        response = api.client.put(
            f"/api/v1/jobs/{job_id}", json={"title": "Hacked"}, headers=api.headers(globex)
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found or access denied"
        assert api.get(f"/jobs/{job_id}").json()["title"] == "Engineer"

    def test_not_owned_and_missing_look_the_same(self, api):
        acme = api.register_company("Acme", "hr@acme.com")
        globex = api.register_company("Globex", "hr@globex.com")
        job_id = api.create_job_id(acme)

        not_owned = api.client.delete(f"/api/v1/jobs/{job_id}", headers=api.headers(globex))
        missing = api.client.delete("/api/v1/jobs/424242", headers=api.headers(globex))

        assert not_owned.status_code == missing.status_code == 404
        assert not_owned.json() == missing.json()

    def test_owner_deletes_job_and_its_applications(self, api):
        acme = api.register_company()
        bob = api.register_applicant()
        job_id = api.create_job_id(acme)
        assert api.apply(bob, job_id).status_code == 201

        response = api.client.delete(f"/api/v1/jobs/{job_id}", headers=api.headers(acme))

        assert response.status_code == 200
        assert response.json() == {"message": "Job deleted successfully"}
        assert api.get(f"/jobs/{job_id}").status_code == 404
        assert api.get("/applications/my-applications", bob).json() == []

    def test_applicant_cannot_delete(self, api):
        acme = api.register_company()
        bob = api.register_applicant()
        job_id = api.create_job_id(acme)

        response = api.client.delete(f"/api/v1/jobs/{job_id}", headers=api.headers(bob))
        assert response.status_code == 403
