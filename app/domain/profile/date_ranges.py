from datetime import date, datetime

from app.domain.profile.schemas import DateRange


def plan_date_ranges(created_at: datetime, now: datetime) -> list[DateRange]:
    """계정 생성 연도부터 현재 연도까지 연 단위 기간 목록 생성

    GitHub 검색은 쿼리당 최대 1000건만 반환하므로 기간을 연 단위로 나눠 조회.
    생성 연도와 현재 연도도 1월 1일 ~ 12월 31일 전체 구간을 사용.

    Args:
        created_at: 계정 생성 시각
        now: 기준 시각

    Returns:
        연도 오름차순 기간 목록, 최소 1개
    """
    end_year = now.year
    start_year = min(created_at.year, end_year)

    return [
        DateRange(start=date(year, 1, 1), end=date(year, 12, 31))
        for year in range(start_year, end_year + 1)
    ]
